"""HTTP layer: application factory, routers and middleware."""
