"""
Entry point for the QuizPulse API service.

Run with:
    uvicorn main:app --reload --port 3000
    python main.py
"""
import uvicorn

from quizpulse.api.main import app
from quizpulse.config import get_settings
from quizpulse.log import configure_logging

settings = get_settings()

if __name__ == "__main__":
    configure_logging(settings.log_level, settings.log_file)
    uvicorn.run(
        "quizpulse.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
