"""Domain layer: records, ports and the feature resolution engine."""
