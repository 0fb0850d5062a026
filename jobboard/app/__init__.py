"""HTTP layer of the job board."""
