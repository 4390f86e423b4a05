"""Option contracts, payoffs, closed-form pricing and simulation."""
