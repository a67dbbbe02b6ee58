"""Services module.

This module provides the service layer architecture:
- exceptions: Base service exceptions
- catalog: Product taxonomy lookups and the product read model
- orders: Order submission and persistence sequencing
- storage: S3 object storage for uploaded design assets
- notifications: Order notification email
- dashboard: Admin dashboard aggregation
- auth: Back-office login
"""
