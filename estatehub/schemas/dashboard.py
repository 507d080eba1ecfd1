"""
Admin dashboard summary schema.
"""

from estatehub.schemas.base import CamelModel


class DashboardSummary(CamelModel):
    """Live counts across users, properties and reviews."""

    total_users: int
    total_admins: int
    total_agents: int
    all_properties: int
    pending_properties: int
    accepted_properties: int
    rejected_properties: int
    total_reviews: int
    advertised_properties: int
