"""
Optional integrations.

- dependency_injector: IoC container wiring the session and client
"""
