"""Lecture audio transcription and summarization backend."""
