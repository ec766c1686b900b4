"""Service wrappers between the API routes and the scheduling engine."""
