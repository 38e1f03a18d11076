# This file marks the services package for API query modules.
# It exists so routers can depend on cohesive service classes instead of raw SQL.
# Service modules isolate query logic from transport concerns.
