"""
climbcalc core: IR, errors, settings, and the expression language.
"""
