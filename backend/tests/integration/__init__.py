"""
Integration tests package.

Integration tests drive the FastAPI app over HTTP (httpx ASGITransport)
against a per-test in-memory SQLite database.

To run only integration tests:
    pytest -m integration -v

To skip them:
    pytest -m "not integration" -v
"""
