"""QuizPulse command line interface."""
