"""
Fabric Check - material and size-stock extraction for fashion retailers

Modules:
    models      - Data models (SiteVariant, ProductReference, ExtractionResult)
    common      - Shared utilities (config loader, logging, result cache)
    fetch       - HTTP fetch collaborator (PageFetcher)
    extraction  - Site detection, site strategies and the orchestrator
"""
