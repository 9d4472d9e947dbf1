"""Development server for the humidity API.

    python -m ahcheck.server

Starts uvicorn with auto-reload on port 5000. Deployments point uvicorn at
the app factory instead:

    uvicorn ahcheck.server.entrypoint:create_app --factory --port 5000
"""
import uvicorn


def main() -> None:
    """Serve ``create_app`` with reload enabled."""
    uvicorn.run(
        "ahcheck.server.entrypoint:create_app",
        factory=True,
        host="0.0.0.0",
        port=5000,
        reload=True,
    )


if __name__ == "__main__":
    main()
