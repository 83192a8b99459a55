"""QuizPulse REST API."""
