"""
Intake Context

Responsibilities:
- Validates application forms and uploaded resumes
- Stores uploads under safe, collision-free names
- Registers submissions and drives their status (pending -> processing -> completed/failed)
- Serves generated summaries back to callers

Owns: Submission records, upload storage, submission lifecycle
Never: Lays out or edits PDF content
"""
