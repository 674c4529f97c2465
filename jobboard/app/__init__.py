"""Development backend serving the job and user endpoints."""
