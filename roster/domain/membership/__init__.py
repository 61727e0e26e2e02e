"""
Membership bounded context: users, auth users, teams and members.
"""
