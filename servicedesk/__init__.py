"""Service-desk notification core.

Generates, routes and tracks read state for in-app notifications raised by
complaint, evaluation, technician and service-request events.
"""
