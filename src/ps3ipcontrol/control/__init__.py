"""Command routing, sequencing and power state inference.

Turns a request path into an :class:`~ps3ipcontrol.domain.models.Action`
and realizes it as a timed sequence of GIMX invocations.
"""
