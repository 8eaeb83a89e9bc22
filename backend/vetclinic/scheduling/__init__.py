"""
Scheduling core for clinic visits:
- Clinic operating limits (rules.py)
- Overlap detection (overlap.py)
- Daily admission control (capacity.py)
- Ordered admit/reject decision (validator.py)
- Per-date serialization (locks.py)
- Create/reschedule/delete (lifecycle.py)
- Day availability listing (availability.py)
"""
