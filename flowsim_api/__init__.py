"""HTTP API for the workflow simulator (FastAPI).

Modules:
- main: App factory composing store, executor and event bus
- event_bus: SSE fan-out of store events
- routes: node type catalog, graph editing, execution
"""
