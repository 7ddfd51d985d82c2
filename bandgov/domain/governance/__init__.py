"""Pure governance rules: permissions, tallying, edit and resubmission guards."""
