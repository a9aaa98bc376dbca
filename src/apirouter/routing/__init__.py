"""Routing — path templates, route records, and the ordered route table.

Routes are registered during setup and the table freezes when the router
starts serving.
"""
