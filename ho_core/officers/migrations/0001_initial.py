from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="HouseOfficer",
            fields=[
                ("id", models.CharField(editable=False, max_length=64, primary_key=True, serialize=False)),
                ("full_name", models.CharField(db_column="fullName", max_length=255)),
                (
                    "gender",
                    models.CharField(choices=[("Male", "Male"), ("Female", "Female")], max_length=16),
                ),
                ("date_signed_in", models.DateField(db_column="dateSignedIn")),
                (
                    "unit_assigned",
                    models.CharField(
                        choices=[
                            ("Cardiology 1", "Cardiology 1"),
                            ("Cardiology 2", "Cardiology 2"),
                            ("Nephrology", "Nephrology"),
                            ("Neurology", "Neurology"),
                            ("Endocrinology", "Endocrinology"),
                            ("Pulmonology", "Pulmonology"),
                            ("Gastroenterology", "Gastroenterology"),
                            ("Infectious Disease/Dermatology", "Infectious Disease/Dermatology"),
                            ("Rheumatology", "Rheumatology"),
                        ],
                        db_column="unitAssigned",
                        db_index=True,
                        max_length=64,
                    ),
                ),
                (
                    "clinical_presentation_topic",
                    models.CharField(blank=True, db_column="clinicalPresentationTopic", default="", max_length=255),
                ),
                (
                    "clinical_presentation_date",
                    models.DateField(blank=True, db_column="clinicalPresentationDate", null=True),
                ),
                ("expected_sign_out_date", models.DateField(db_column="expectedSignOutDate")),
                ("created_at", models.DateTimeField(db_column="createdAt", db_index=True)),
            ],
            options={
                "db_table": "house_officers",
                "ordering": ["-created_at"],
            },
        ),
    ]
