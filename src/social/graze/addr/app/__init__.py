"""
ADDR Application Layer

This package implements the web application layer for the ADDR service, handling HTTP requests
and responses using the aiohttp framework.

Key Components:
- cli.py: Entry point for running the application
- server.py: Web server configuration, middleware setup and shared resources
- config.py: Configuration management using Pydantic settings
- handlers/: Request handlers for the resolve and internal endpoints
- cors.py: CORS headers applied to every response
- metrics.py: StatsD metrics abstraction

The application uses several middleware layers:
- CORS middleware, which also turns unhandled errors into JSON responses
- Statsd middleware for metrics collection
- Sentry middleware for error reporting

It provides the following endpoints:
- GET /api?address=... resolves an identifier to a Solana address
- GET /internal/alive and /internal/ready for probes
"""
