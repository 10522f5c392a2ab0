from django.apps import AppConfig


class JobsConfig(AppConfig):
    name = "weatherbatch.jobs"
    label = "weather_jobs"
    verbose_name = "Weather batch jobs"
