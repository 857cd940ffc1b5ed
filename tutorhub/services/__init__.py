# Services package init
"""
TutorHub Backend — Services Layer
==================================

Service Inventory:
    - security:            PasswordHasher (bcrypt), TokenService (HS256)
    - credential_store:    Student / Instructor lookup and creation
    - principal_service:   registration and login, once for both roles
    - instructor_service:  instructor directory and detail queries
    - course_service:      course listings and creation
    - geocoding:           Geocoder interface + Mapbox implementation
    - image_storage:       profile image validation, storage and cleanup

Services take their collaborators as arguments; routes fetch them from
`app.state` through `tutorhub.dependencies`.
"""
