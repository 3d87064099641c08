"""GIMX (Game Input MultipleXer) process control.

GIMX impersonates a Sixaxis controller to the PS3 over Bluetooth. This
package builds GIMX command lines, runs them as external processes and
probes whether the emulator is currently running.
"""
