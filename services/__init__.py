"""
Job Marketplace Matching Services

This package contains the core Python services:
- geo: Coordinate validation and haversine distance
- matching: Category normalization and job/worker matching
- notifier: New-job notification fan-out and push delivery
- jobs: Job posting, assignment, status and location disclosure
- workers: Worker profiles and notification inboxes
- ratings: Job reviews and worker rating aggregation
"""
