"""Job board features: auth, access policy, jobs and applications."""
