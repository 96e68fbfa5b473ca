"""
Remote sync.

Components:
- transport.py: httpx-based GET/POST of the entries list
- controller.py: startup pull + push-per-tick, outcomes as messages
- ticker.py: fixed-interval tick loop
"""
