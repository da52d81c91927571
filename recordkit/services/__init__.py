"""Services - wiring and schema validation built on the core protocols."""
