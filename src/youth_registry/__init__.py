"""Youth Registry package.

Feature modules (persons, activities, checkin) sit on top of a small HTTP
layer (api) talking to the group's REST backend. Flask controllers stay thin;
the reconciliation logic lives in the service layer.
"""
