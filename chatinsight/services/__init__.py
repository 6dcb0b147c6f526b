"""Chat insight microservices."""
