"""Cell lab configuration: defaults, environment settings and YAML loaders."""
