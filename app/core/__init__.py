"""Pure maintenance workflow core.

Side-effect-free rules shared by the services: who may do what, how the
derived metrics are computed, which status transitions are legal, how PM
schedules roll over, and what an asset's maintenance trail records.

Modules:
    role_guard: Role-based permission table
    metrics: Turnaround, man-hours and parts cost
    request_lifecycle: Work request state machine (planning functions)
    recurrence: PM schedule rollover
    asset_ledger: Maintenance history entries
"""
