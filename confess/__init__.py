"""confess — content moderation engine for the CampusConfess board."""

__version__ = "0.1.0"
