"""Thunder modules and a Pulumi dynamic provider for Redis Cloud databases."""
