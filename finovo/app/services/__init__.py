"""
Services package.
Business logic shared by the API routers and the CLI.

- auth_service: password hashing and in-memory sessions
- user_service: user accounts (and their profile row)
- profile_service: profile lookup with bounded retry, profile and goal updates
- user_context: per-request user/profile/goals bundle
- ledger_service: expenses and investments
- dashboard_service: loads rows and feeds utils.budget_math
- content_catalog: static educational topics
"""
