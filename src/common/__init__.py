"""Shared configuration, logging and identity lookup."""
