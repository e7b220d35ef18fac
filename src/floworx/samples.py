"""Sample onboarding payloads, one per supported industry."""

SAMPLE_BUSINESSES: dict[str, dict] = {
    "hot-tub-spa": {
        "business_data": {
            "user_id": "demo_hottub",
            "company_name": "The Hot Tub Man Ltd",
            "business_phone": "(555) 123-4567",
            "emergency_phone": "(555) 999-9999",
            "business_address": "123 Spa Street, Hot Springs, CA 90210",
            "service_area_radius": 25,
            "business_hours": "Mon-Fri 8AM-6PM",
            "response_time_goal": "4_hours",
            "primary_services": ["installation", "repair", "maintenance", "water_care"],
            "industry": "hot-tub-spa",
            "business_email": "service@thehotubman.com",
        },
        "custom_managers": ["Hailey", "Jillian", "Stacie", "Aaron"],
        "custom_suppliers": ["Aqua Spa Pool Supply", "Paradise Patio Furniture Ltd", "Strong Spas"],
        "phone_system": "RingCentral",
    },
    "hvac": {
        "business_data": {
            "user_id": "demo_hvac",
            "company_name": "ABC HVAC Services",
            "business_phone": "(555) 987-6543",
            "emergency_phone": "(555) 911-HVAC",
            "business_address": "456 Climate Control Ave, Comfort City, TX 75001",
            "service_area_radius": 50,
            "business_hours": "Mon-Sat 7AM-7PM",
            "response_time_goal": "1_hour",
            "primary_services": ["heating_repair", "cooling_repair", "installation", "maintenance"],
            "industry": "hvac",
            "business_email": "service@abchvac.com",
        },
        "custom_managers": ["Mike Johnson", "Sarah Chen", "Tom Rodriguez"],
        "custom_suppliers": ["Carrier Parts Direct", "Trane Supply Co", "Honeywell Wholesale"],
        "phone_system": "Vonage",
    },
    "plumbing": {
        "business_data": {
            "user_id": "demo_plumbing",
            "company_name": "Quick Fix Plumbing",
            "business_phone": "(555) PLUMBER",
            "emergency_phone": "(555) 24-HOURS",
            "business_address": "789 Pipe Lane, Watertown, FL 33101",
            "service_area_radius": 30,
            "business_hours": "24/7 Emergency Service",
            "response_time_goal": "1_hour",
            "primary_services": ["emergency_repair", "drain_cleaning", "installation", "water_heater"],
            "industry": "plumbing",
            "business_email": "dispatch@quickfixplumbing.com",
        },
        "custom_managers": ["Carlos Martinez", "Lisa Wong"],
        "custom_suppliers": ["Ferguson Plumbing", "Home Depot Pro", "Local Pipe Supply", "Emergency Parts Co"],
        "phone_system": "Google Voice",
    },
    "landscaping": {
        "business_data": {
            "user_id": "demo_landscaping",
            "company_name": "Green Thumb Landscaping",
            "business_phone": "(555) GARDENS",
            "business_address": "321 Garden Way, Greenville, OR 97001",
            "service_area_radius": 40,
            "business_hours": "Mon-Sat 6AM-8PM",
            "response_time_goal": "24_hours",
            "primary_services": ["lawn_care", "landscaping", "tree_service", "irrigation"],
            "industry": "landscaping",
            "business_email": "info@greenthumblandscaping.com",
        },
        "custom_managers": ["Maria Rodriguez", "Jake Thompson", "Amy Chen"],
        "custom_suppliers": ["Landscape Supply Co", "Tree Nursery Direct", "Irrigation Wholesale"],
        "phone_system": "RingCentral",
    },
}
