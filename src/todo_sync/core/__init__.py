"""
State engine.

Components:
- models.py: data structures (Entry, Filter)
- state.py: TodoState with filter-relative index resolution and mutators
- messages.py: typed messages accepted by the engine
- engine.py: serialized message loop, the single writer of TodoState
- ports.py: Protocols for storage and transport
"""
