"""
Run the API server on port 3001.
Usage: python3 run.py   (from the project root)
"""
import uvicorn

from config import settings

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=3001,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
