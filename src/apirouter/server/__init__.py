"""Request pipeline — auth gate, error boundary, response sending, ASGI adapter."""
