"""Host-side glue that drives a Machine in real time."""
