"""Data model of the CAS: atoms, operators, expressions, definitions and the Environment."""
