"""
Error taxonomy for the itinerary planning pipeline.

- TransportError: the generative model could not be reached or refused the call
- ParseError: the model answered, but not with a usable itinerary document
- InputValidationError: the trip form itself is malformed (raised before planning)
"""

from typing import Any, Dict, List, Optional


class PlannerError(Exception):
    """Base class for planner errors"""


class TransportError(PlannerError):
    """Network, timeout, auth or quota failure while calling the model"""


class ParseError(PlannerError):
    """Model output is not a structurally valid itinerary"""


class InputValidationError(PlannerError, ValueError):
    """Trip form failed validation"""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []
