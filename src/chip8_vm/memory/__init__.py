"""Memory: RAM and the built-in font."""
