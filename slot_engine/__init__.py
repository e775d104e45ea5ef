"""Appointment slot computation from weekly availabilities and schedule exceptions."""
