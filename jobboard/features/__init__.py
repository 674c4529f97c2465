"""Feature packages: jobs, users and profile updates."""
