"""Application services: orchestration over repositories and ports."""
