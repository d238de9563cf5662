"""Request, response and option models, one module per Plaid product."""
