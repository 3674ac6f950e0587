"""Configuration, logging, store access and security primitives."""
