"""HTTP binding for the ClickUp gateway."""
