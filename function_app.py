"""Website contact form function app"""
import azure.functions as func
from src.contact_form.blueprints.bp_contact_form import bp as contact_form_bp

app = func.FunctionApp()

# Register the blueprints
app.register_blueprint(contact_form_bp)  # Contact Form HTTP Trigger
