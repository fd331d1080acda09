"""
Request, response and option models.
"""
