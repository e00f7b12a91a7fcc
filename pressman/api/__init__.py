"""
Pressman REST API.

Provides DRF ViewSets for:
- Orders (list/create/update/delete + workflow actions)
- Board (projected columns per view mode)
- Notifications (feed, alerts, actions, password reset)
- Stats (dashboard counters and analytics)
"""
