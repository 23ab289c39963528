"""Domain records and scheduling rules."""
