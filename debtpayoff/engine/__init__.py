"""Month-by-month payoff simulation engine."""
