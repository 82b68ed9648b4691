"""HTTP primitives consumed by the router: methods, headers, request, response."""
