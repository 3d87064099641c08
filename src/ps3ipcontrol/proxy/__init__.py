"""HTTP front end of the proxy."""
