"""Pomato -- Pomodoro timer and task list for the terminal."""
