"""FraudCheck assignment submission and review service."""
