"""
Configuration settings for the local vector database
"""
import os

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", 8000))

# Storage Configuration
DATA_DIR = os.getenv("DATA_DIR", "./data")
REGISTRY_FILENAME = "indexes.json"
CONFIG_FILENAME = "config.json"
VECTORS_FILENAME = "vectors.json"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Index Configuration
INDEX_NAME_PATTERN = r"^[a-z0-9-]+$"
MAX_INDEX_NAME_LENGTH = 45
