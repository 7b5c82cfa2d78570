# Routes package init
"""
Timeledger Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles one resource family.

Route Inventory:
    - users.py:         POST/GET /api/users
                        GET  /api/users/{id}/time-entries  (time_entries.py)
    - clients.py:       POST/GET /api/clients, contacts per client
    - projects.py:      projects per client, positions per project
    - time_entries.py:  POST /api/time-entries, a user's bookings
    - crm.py:           client notes and activity logs
    - reports.py:       GET /api/reports/{utilization,budget-consumption,booking-details}
    - health.py:        GET /health

Design Principle:
    Routes are THIN. They extract request data, call a service and shape
    the response. Business logic belongs in services.
"""
