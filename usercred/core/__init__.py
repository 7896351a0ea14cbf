"""Core, cross-cutting concerns: settings, logging, errors, lifecycle."""
