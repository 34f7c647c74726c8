"""Authorization: registry, evaluation, scope, classification and tier charts."""
