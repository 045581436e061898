"""Static export of rendered panels."""
