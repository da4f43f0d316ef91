"""
Project Domain - Projects and their execution.

This domain handles scheduling rules of project timelines:
- Timeline duration from start/end dates
- Task planned end from start and duration
- Working-day calendars with holidays
- Progress roll-up from tasks to the timeline
"""
