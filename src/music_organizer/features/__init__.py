"""Feature packages of the organize pipeline."""
