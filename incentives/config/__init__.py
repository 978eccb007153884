"""Configuration: settings, logging and business constants."""
