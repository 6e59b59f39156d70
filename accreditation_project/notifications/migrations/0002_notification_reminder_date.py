from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("notifications", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="notification",
            name="reminder_date",
            field=models.DateField(blank=True, null=True),
        ),
        migrations.AddIndex(
            model_name="notification",
            index=models.Index(
                fields=["assignment", "type", "reminder_date"],
                name="notificatio_assignm_5c81d0_idx",
            ),
        ),
    ]
