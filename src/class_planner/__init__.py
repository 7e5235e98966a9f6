"""Weekly class schedule planner: conflict-free section combinations and .ics export."""

__version__ = "0.1.0"
