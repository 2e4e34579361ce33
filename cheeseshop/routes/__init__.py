# Routes package init
"""
Cheese Shop API — API Routes Package
=====================================

Route Inventory:
    - cheeses.py:  GET /cheeses               (list every cheese)
                   GET /cheeses/{cheese_id}   (get one cheese)
    - health.py:   GET /health                (service health check)

Routes stay thin: parse the request, call the service, return the result.
"""
