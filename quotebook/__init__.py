"""Quote management: entity store, totals and PDF export."""
