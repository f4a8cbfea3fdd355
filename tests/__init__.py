"""
Test suite for the Clinic Backend.

Contains unit and integration tests for the application's functionality.
"""
import os

# Set environment for testing, before the application settings are loaded
os.environ["TESTING"] = "1"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["AES_SECRET_KEY"] = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"
os.environ["BCRYPT_ROUNDS"] = "4"
