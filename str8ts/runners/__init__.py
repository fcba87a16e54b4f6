"""End-to-end solve pipeline, diagnostics and command-line runner."""
