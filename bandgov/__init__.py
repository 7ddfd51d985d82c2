"""
bandgov - Proposal Governance & Voting Engine

Turns a Band's deliberation into binding decisions: proposals move
through a reviewed lifecycle, members vote with upsert semantics, and
type-specific tally rules decide the outcome.

Layers:
- domain: models, state machines, tally and permission rules
- application: ports and the services exposed to the API layer
- infrastructure: in-memory stubs, adapters and observability
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
