"""
Activations module - License validation and device binding.

This module handles:
- Activation record entity (append-only history)
- ActivationEngine: first-activation binding, re-validation and lazy expiry
- Activation record persistence
"""
