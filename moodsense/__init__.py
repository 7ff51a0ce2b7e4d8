"""MoodSense - behavioral pattern and context engine for daily mood check-ins.

Turns a user's raw check-in history (mood score, optional note, timestamp)
into a structured context bundle and the grounding text handed to a
coaching model.
"""
