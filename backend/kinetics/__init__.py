"""
Swing Kinetics Core

Scoring engine for baseball swings: kinematic sequence, contact quality,
population percentiles, kinetic fingerprint and ball flight.
"""
