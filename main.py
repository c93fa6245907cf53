"""Main entry point for the Patent Translation Review API."""

import uvicorn
from patent_review_api.config import get_settings


def main():
    """Run the review API server."""
    settings = get_settings()

    print("Starting Patent Translation Review API...")
    print(f"Server will run on http://{settings.api_host}:{settings.api_port}")
    print(f"API Documentation available at http://{settings.api_host}:{settings.api_port}/docs")

    uvicorn.run(
        "patent_review_api.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
