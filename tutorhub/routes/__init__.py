# Routes package init
"""
TutorHub Backend — API Routes Package
======================================

Route Inventory:
    - principals.py:  POST /student/register, /student/login,
                      /instructor/register, /instructor/login
    - instructors.py: GET  /instructor, /instructor/{id}
    - courses.py:     GET  /course, /course/{id}, /course/category/{id}
                      POST /course
    - uploads.py:     GET  /uploads/{path}
    - health.py:      GET  /health

Routes stay thin: they read the request, call one service method and
return its result. Business rules live in `tutorhub.services`.
"""
