"""Rich terminal front end."""
