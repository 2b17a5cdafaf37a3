"""Response schemas for the dashboard aggregates."""

from pydantic import BaseModel


class LeadStats(BaseModel):
    """Lead counts per funnel status."""
    total: int
    new: int
    qualified: int
    consultation: int
    closed: int
    lost: int


class InvestmentStats(BaseModel):
    total_investments: int
    total_amount: float
    total_current_value: float
    active_investors: int


class EmailStats(BaseModel):
    """Engagement totals. Rates are percentages of sends, 0 when nothing was sent."""
    total_sent: int
    total_opened: int
    total_clicked: int
    open_rate: float
    click_rate: float
