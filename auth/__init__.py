"""
auth — User authentication module.

Provides:
  • Credential checks (email grammar, password strength)
  • Password hashing (bcrypt, cost factor 10)
  • Signup / login chains returning tagged outcomes
  • Signup / Login API routes
"""
