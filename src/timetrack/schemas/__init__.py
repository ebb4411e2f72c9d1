"""Request and response schemas. JSON keys are camelCase."""
