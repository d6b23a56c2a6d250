"""Business logic for the TTS service"""
