"""Core plumbing shared by the task engine: ports, state store, timers."""
