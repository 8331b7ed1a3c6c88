"""C1 Ticket Models - Ticket snapshots and payloads."""
from nexus_engine.c1_ticket_models.ticket import Ticket, TicketCreate, TicketUpdate

__all__ = ["Ticket", "TicketCreate", "TicketUpdate"]
