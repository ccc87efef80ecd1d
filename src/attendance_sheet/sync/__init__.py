"""Client-side persistence: debounced auto-save, local mirror and HTTP client."""
