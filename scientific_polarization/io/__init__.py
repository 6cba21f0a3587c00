"""Arrow schemas and output-path conventions for run artifacts."""
