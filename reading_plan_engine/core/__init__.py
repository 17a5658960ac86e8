"""Core configuration, logging, ports and domain models."""
