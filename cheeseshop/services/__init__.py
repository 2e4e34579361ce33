# Services package init
"""
Cheese Shop API — Services Layer
=================================

Service Inventory:
    - CheeseService: catalogue reads, seeding inserts, wire serialization
"""
