"""Gunicorn entry point for the athlete social service.

Serves the follow graph, notification feed and privacy APIs from
athlete_network.wsgi. Logging is configured by the social app on startup,
so gunicorn only forwards its own access and error logs to stdout/stderr.
"""

import sys

from gunicorn.app.wsgiapp import run


def main():
    """Start the athlete social service using Gunicorn.

    Configures and launches Gunicorn with production-ready settings:
    - Binds to 0.0.0.0:8000 for container accessibility
    - Uses 4 worker processes for concurrent request handling
    - 2 threads per worker for improved throughput
    - 60-second timeout for long-running requests
    - Logs to stdout/stderr for container log aggregation
    """
    sys.argv = [
        "gunicorn",
        "athlete_network.wsgi:application",
        "--bind",
        "0.0.0.0:8000",
        "--workers",
        "4",
        "--threads",
        "2",
        "--timeout",
        "60",
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]
    run()


if __name__ == "__main__":
    main()
