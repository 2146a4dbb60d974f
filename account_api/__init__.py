"""Backend for the single-account profile settings page."""
