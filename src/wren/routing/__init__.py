"""Routing: patterns, routes, and the ordered route table.

Routes are registered during setup, appended in order, and frozen when
the app compiles. Dispatch tries them strictly in registration order.
"""
