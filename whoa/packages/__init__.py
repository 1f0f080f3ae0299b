"""Framework packages, each providing container configurators, middleware, settings and commands."""
