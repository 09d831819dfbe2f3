"""Scheduling domain - Slots, availability and the appointment lifecycle

- slots.py         # "HH:MM-HH:MM" encoding of one-hour windows
- availability.py  # Free slots per doctor and date (exact slot match)
- service.py       # Book / reschedule / cancel / complete, date and upcoming views
- repository.py    # Appointment queries
- router.py        # /appointments endpoints
"""
