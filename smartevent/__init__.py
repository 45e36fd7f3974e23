"""Smart Event Organizer: in-memory event management with role dashboards."""
