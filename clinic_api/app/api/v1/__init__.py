"""Version 1 of the Clinic API."""
