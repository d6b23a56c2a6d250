"""Text-to-speech service: Polly synthesis stored on S3"""
